[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pushrelay"
version = "0.1.0"
description = "Push notification requests, APNs and FCM payload builders, push logging and statistics storage"
requires-python = ">=3.10"
keywords = ["push", "notification", "apns", "fcm", "huawei", "mobile"]
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
    "Topic :: Communications",
]
dependencies = [
    "redis",
    "httpx",
]

[project.optional-dependencies]
test = [
    "pytest",
    "respx",
]

[tool.hatch.build.targets.wheel]
packages = ["pushrelay"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
