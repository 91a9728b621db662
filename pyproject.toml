[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "syslabs"
version = "0.1.0"
description = "Small systems programs: a static/CGI HTTP server, TCP echo and chat, thread exercises and Tk calculators"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "http",
    "cgi",
    "tcp",
    "echo",
    "chat",
    "threads",
    "producer-consumer",
    "mutex",
    "calculator",
    "tkinter",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Communications :: Chat",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
syslabs-httpd = "syslabs.httpd:main"
syslabs-echo = "syslabs.echo:main"
syslabs-chat = "syslabs.chat:main"
syslabs-bounded-buffer = "syslabs.bounded_buffer:main"
syslabs-threads = "syslabs.threads:main"
syslabs-calculator = "syslabs.calculator:main"
syslabs-widgets = "syslabs.widgets:main"

[tool.setuptools]
packages = ["syslabs"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
