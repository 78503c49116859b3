[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nexuspoint"
version = "0.1.0"
description = "Three small cooperating WSGI services: a central user and product service, a profile gateway and a JSON relay."
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "wsgi", "microservices", "json", "gateway"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nexuspoint-central = "nexuspoint.central:main"
nexuspoint-gateway = "nexuspoint.gateway:main"
nexuspoint-jsonapp = "nexuspoint.jsonapp:main"

[tool.hatch.build.targets.wheel]
packages = ["nexuspoint"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
