from setuptools import setup

import re
import io
import os.path


def read(*names, **kwargs):
    with io.open(
        os.path.join(os.path.dirname(__file__), *names),
        encoding=kwargs.get("encoding", "utf8")
    ) as fp:
        return fp.read()

def find_version(*file_paths):

    version_file = read(*file_paths)
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                              version_file, re.M)
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


setup(
    name='BBBase62',
    version=find_version('bbbase62', '__init__.py'),
    packages=['bbbase62'],
    description='Base62 encoding of 64-bit integers with configurable alphabets.',
    long_description=read('README.md'),
    long_description_content_type='text/markdown',
    python_requires='>=3.6',
    install_requires=['tornado', 'pyyaml', 'jsonschema'],
    extras_require={
        'test': ['pytest']
    },
    test_suite='tests',
)
