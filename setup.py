# setup.py
from setuptools import setup, find_packages

setup(
    name="glisp",
    version="0.1.0",
    description="A small Lisp dialect: scanner, parser and tree-walking evaluator",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["glisp=glisp.__main__:main"],
    },
    zip_safe=False,
)
