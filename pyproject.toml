[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "triageflow"
version = "0.1.0"
description = "Decision logic for issue and pull request triage: reviewer assignment, labelling, mentions and notifications"
requires-python = ">=3.10"
dependencies = []
keywords = ["triage", "github", "pull-requests", "reviewers", "labels", "zulip"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Bug Tracking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["triageflow"]

[tool.pytest.ini_options]
addopts = "-ra"
