# Copyright European Space Agency, 2013

from setuptools import setup, find_packages
import re

# version handling from https://stackoverflow.com/a/7071358
VERSIONFILE="satview/_version.py"
verstrline = open(VERSIONFILE, "rt").read()
VSRE = r"^__version__ = ['\"]([^'\"]*)['\"]"
mo = re.search(VSRE, verstrline, re.M)
if mo:
    verstr = mo.group(1)
else:
    raise RuntimeError("Unable to find version string in %s." % (VERSIONFILE,))

setup(
    name = 'satview',
    description = 'Satellite view geometry: geodesy, pointing and frequency reuse',
    long_description = open('README.rst').read(),
    version = verstr,
    license = 'ESCL - Type 1',
    classifiers=[
      'Development Status :: 4 - Beta',
      'Intended Audience :: Science/Research',
      'Natural Language :: English',
      'Programming Language :: Python :: 3',
      'Operating System :: OS Independent',
      'Topic :: Scientific/Engineering',
      'Topic :: Software Development :: Libraries',
    ],
    packages = find_packages(),
    python_requires='>=3.6',
    install_requires=['numpy>=1.10',
                      'numexpr',
                      'geographiclib',
                      'astropy>=3.0',
                      ],
    extras_require = {
        'test': ['pytest'],
    },
)
