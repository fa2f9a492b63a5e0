import os
from setuptools import setup, find_packages


NAME = 'vprov'

VERSION = '0.1'

DESCRIPTION = """
Pluggable resource provisioning layer translating abstract compute constraints
and storage requests into backend operations.
"""

LICENSE = 'MIT'

URL = 'https://github.com/vprov/vprov'

AUTHOR = 'vprov developers', 'dev@vprov.org'

KEYWORDS = 'provisioning storage constraints maas cluster cloud'

CLASSIFIERS = [
    'Programming Language :: Python :: 3',
    'License :: OSI Approved :: MIT License',
    'Framework :: Twisted',
]


def read(fname, fail_silently=False):
    """
    Utility function to read the README file.
    """
    try:
        with open(os.path.join(os.path.dirname(__file__), fname)) as fh:
            return fh.read()
    except IOError:
        if not fail_silently:
            raise
        return ''


def requirements(fname):
    """
    Utility function to create a list of requirements from the output of the
    pip freeze command saved in a text file.
    """
    packages = read(fname).split('\n')
    packages = (p.strip() for p in packages)
    packages = (p for p in packages if p and not p.startswith('#'))
    return list(packages)


setup(
    name=NAME,
    version=VERSION,
    description=' '.join(DESCRIPTION.strip().splitlines()),
    long_description=read('README.md', True),
    long_description_content_type='text/markdown',
    classifiers=CLASSIFIERS,
    keywords=KEYWORDS,
    author=AUTHOR[0],
    author_email=AUTHOR[1],
    url=URL,
    license=LICENSE,
    packages=find_packages(),
    python_requires='>=3.7',
    install_requires=requirements('requirements.txt'),
)
