import os
import re

from setuptools import find_packages, setup


def get_version():
    with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'chimfilter', '__init__.py')) as fh:
        return re.search(r"__version__ = '([^']+)'", fh.read()).group(1)


def read_readme():
    """
    the long description is optional, fall back to an empty string when the readme is not shipped
    """
    try:
        with open('README.md') as fh:
            return fh.read()
    except OSError:
        return ''


# HSTLIB is a dependency for pysam.
# The cram file libraries fail for some OS versions and chimfilter does not use cram files so we disable these options
os.environ['HTSLIB_CONFIGURE_OPTIONS'] = '--disable-lzma --disable-bz2 --disable-libcurl'


TEST_REQS = [
    'timeout-decorator>=0.3.3',
    'coverage>=4.2',
    'pycodestyle>=2.3.1',
    'pytest',
    'pytest-cov',
]


INSTALL_REQS = [
    'numpy>=1.13.1',
    'pandas>=1.1.5',
    'pysam>=0.15.2',
]


setup(
    name='chimfilter',
    version=get_version(),
    packages=find_packages(exclude=['tests', 'tests.*']),
    description='Filtering of chimeric RNA-seq alignments supporting candidate gene fusions',
    long_description=read_readme(),
    long_description_content_type='text/markdown',
    install_requires=INSTALL_REQS,
    extras_require={
        'test': TEST_REQS,
        'dev': ['black', 'flake8'] + TEST_REQS,
    },
    tests_require=TEST_REQS,
    python_requires='>=3.6',
    test_suite='tests',
)
