#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages
from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='smimeverdict',
    version=__import__('smimeverdict').__version__,
    description='Verification of S/MIME signed email with end user friendly trust verdicts.',
    long_description=long_description,
    long_description_content_type='text/x-rst',
    author='smimeverdict developers',
    license='MIT',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Operating System :: OS Independent',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Topic :: Communications :: Email',
        'Topic :: Security :: Cryptography',
    ],
    keywords='cryptography pki x509 smime email asn1 cms pkcs7',
    packages=find_packages(exclude=['examples', 'tests']),
    include_package_data=True,
    platforms=["all"],
    python_requires='>=3.9',
    install_requires=['cryptography', 'asn1crypto', 'attrs'],
    extras_require={'test': ['pytest']},
    test_suite="tests",
)
