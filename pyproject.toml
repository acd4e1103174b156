[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "desktools"
version = "0.1.0"
description = "Status-line components, a status printer, a file-test filter and menu matching logic for minimal desktops"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = [
    "status bar",
    "system monitor",
    "battery",
    "memory",
    "network",
    "file test",
    "menu",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
desktools-status = "desktools.slstatus:main"
desktools-stest = "desktools.stest:main"

[tool.hatch.build.targets.wheel]
packages = ["desktools"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
