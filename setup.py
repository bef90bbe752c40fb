import os

import setuptools

# Make sure that README.md decodes in environments that use the C locale
# (which implies ASCII), by explicitly giving the encoding.
with open(os.path.join(os.path.dirname(__file__), "README.md"), encoding="utf-8") as f:
    long_description = f.read()


setuptools.setup(
    name="curseshelper",
    # MAJOR.MINOR.PATCH, per http://semver.org
    version="0.1.0",
    description="Symbolic styles, scoped terminal state and resize-transparent "
    "key reading for curses programs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    keywords="curses, terminal, color, tui",
    license="ISC",
    py_modules=(
        "cursesscope",
        "cursesstyle",
        "curseshelper",
    ),
    entry_points={
        "console_scripts": ("curseshelper = curseshelper:_main",)
    },
    # Note: like Python's own curses module, this needs windows-curses on
    # Windows. It isn't installed automatically, since that breaks installing
    # on MSYS2 with pip.
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.6",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
        "Topic :: Terminals",
        "Environment :: Console :: Curses",
        "License :: OSI Approved :: ISC License (ISCL)",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.6",
        "Programming Language :: Python :: 3.7",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
    ],
)
