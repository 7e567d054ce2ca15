[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xmppstanza"
version = "0.1.0"
description = "XMPP stream-level elements: stream features, SASL, resource binding, stream management, error conditions and an extension registry"
requires-python = ">=3.10"
dependencies = []
keywords = ["xmpp", "jabber", "stanza", "xml", "stream-management", "sasl"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: XMPP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xmppstanza"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
