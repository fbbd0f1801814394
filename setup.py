from setuptools import setup, find_packages
from os import path, getcwd

# from https://packaging.python.org/tutorials/packaging-projects/

# noinspection SpellCheckingInspection
package_name = "eventgeolocation"

with open("README.md", "r") as fh:
    long_description = fh.read()

try:
    with open(path.join(getcwd(), "VERSION")) as version_file:
        version = version_file.read().strip()
except IOError:
    raise


# classifiers list is here: https://pypi.org/classifiers/

# create the package setup
setup(
    name=package_name,
    version=version,
    description="Geocoding cache and batch address resolution for calendar event locations",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(
        exclude=[
            "*/test",
            "*/test/*",
        ]
    ),
    install_requires=[
        "furl>=2.1.3",
        "boto3>=1.34.140",
        "helix.fhir.client.sdk>=3.0.29",
        "structlog>=23.1.0",
        "aiohttp>=3.10.11,<3.14",
        "pydantic>=2.8.2",
    ],
    extras_require={
        "test": [
            "pytest>=8.2.2",
            "pytest-asyncio>=0.23.8",
            "aioresponses>=0.7.6",
            "moto[ssm]>=5.0.11",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
    dependency_links=[],
    include_package_data=True,
    zip_safe=False,
    package_data={"event_geolocation": ["py.typed"]},
)
