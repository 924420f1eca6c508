[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "amqpkit"
version = "0.1.0"
description = "Client-side state for AMQP 0.9.1: pending results, consumers, queues and outgoing frame scheduling"
requires-python = ">=3.10"
dependencies = []
keywords = ["amqp", "rabbitmq", "messaging", "consumer", "queue"]
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
    "Topic :: System :: Networking",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["amqpkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
