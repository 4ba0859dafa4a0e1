# setup.py
from setuptools import setup, find_packages

setup(
    name="simplex",
    version="0.1.0",
    description="A small expression language with a tree-walking interpreter and language server",
    packages=find_packages(include=["simplex", "simplex.*", "simplex_lsp", "simplex_lsp.*"]),
    package_data={"simplex": ["prelude/std/*.simplex"]},
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "simplex=simplex.__main__:main",
            "simplex-ls=simplex_lsp.server:main",
        ],
    },
    zip_safe=False,
)
