import sys
from setuptools import setup, find_packages

if sys.version_info < (3, 8):
    sys.exit('Sorry, Python < 3.8 is not supported.')

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name="usnglib",
    packages=find_packages(exclude=["tests", "tests.*"]),
    version="1.0",
    license="GPL",
    description="USNG / MGRS, UTM / UPS and latitude/longitude conversions",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Frogmane",
    author_email="",
    url="",
    download_url="",
    keywords=['Geospatial', 'usng', 'mgrs', 'utm', 'ups', 'geo'],
    install_requires=['geographiclib', 'mgrs', 'geojson'],
    extras_require={'test': ['pytest']},
    classifiers=[
          'Development Status :: 4 - Beta',
          'Intended Audience :: Developers',
          'Intended Audience :: Information Technology',
          'Intended Audience :: Science/Research',
          'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
          'Operating System :: Microsoft :: Windows',
          'Operating System :: POSIX :: Linux',
          'Programming Language :: Python',
          'Topic :: Scientific/Engineering :: GIS',
    ]
)
