[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "authgate"
version = "0.1.0"
description = "User registration and login with bcrypt password hashing, JWT access tokens and an HTTP gateway"
requires-python = ">=3.10"
keywords = ["authentication", "login", "registration", "jwt", "bcrypt", "gateway"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration :: Authentication/Directory",
    "Topic :: Internet :: WWW/HTTP",
    "Typing :: Typed",
]
dependencies = [
    "bcrypt>=4.0",
    "pyjwt>=2.8",
    "sqlalchemy>=2.0",
    "starlette>=0.37",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "pytest-asyncio>=0.23",
    "httpx>=0.27",
    "aiosqlite>=0.19",
]

[tool.hatch.build.targets.wheel]
packages = ["authgate"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
