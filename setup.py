#!/usr/bin/env python3

from setuptools import setup, find_packages
import os

directory = os.path.dirname(os.path.abspath(__file__))

# long_description
readme_path = os.path.join(directory, 'README.md')

with open(readme_path) as read_file:
    long_description = read_file.read()


setup(
    name='dbvar-rdf',
    version='0.1.0',
    url='https://github.com/med2rdf/dbvar',
    description='RDF converter for NCBI dbVar GVF files',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(include=['dbvar_rdf', 'dbvar_rdf.*']),
    license='MIT',
    python_requires='>=3.7',
    install_requires=['rdflib>=6.2', 'pyyaml'],
    extras_require={'test': ['pytest']},
    package_data={
        'dbvar_rdf': ['curie_map.yaml', 'translationtable/*.yaml'],
    },
    include_package_data=True,
    entry_points={
        'console_scripts': ['dbvar-rdf=dbvar_rdf.cli:main'],
    },
    keywords='dbvar gvf structural variation rdf faldo turtle',
    classifiers=[
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
        'Topic :: Scientific/Engineering :: Information Analysis',
        'Programming Language :: Python :: 3',
    ],
    scripts=['./dbvar-rdf.py']
)
