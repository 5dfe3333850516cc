from setuptools import setup, find_packages

setup(
    name='levelconv',
    version='0.1.0',
    description='Convert dense and paletted voxel exports into 16x16x16 level data sections',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(include=['levelconv', 'levelconv.*']),
    install_requires=[
        'numpy>=1.20.0',
        'jsonschema>=4.0.0',
    ],
    extras_require={
        'dev': [
            'pytest>=7.0.0',
            'pytest-cov>=4.0.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'levelconv=levelconv.cli:main',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Operating System :: OS Independent',
        'Topic :: Games/Entertainment',
    ],
    python_requires='>=3.8',
    include_package_data=True,
    package_data={
        'levelconv': ['py.typed'],
    },
)
