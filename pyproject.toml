[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coopsched"
version = "0.1.0"
description = "Cooperative multitasking building blocks: generator tasks, round-robin schedulers, owned mutexes and message-passing workers."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "coroutine",
    "cooperative multitasking",
    "scheduler",
    "round robin",
    "mutex",
    "message passing",
    "generators",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
coopsched-scheduler = "coopsched.scheduler:main"
coopsched-asyncwait = "coopsched.asyncwait:main"
coopsched-blatant = "coopsched.blatant:main"
coopsched-duff = "coopsched.duff:main"
coopsched-shared-counter = "coopsched.shared_counter:main"
coopsched-messaging = "coopsched.messaging:main"

[tool.hatch.build.targets.wheel]
packages = ["coopsched"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
