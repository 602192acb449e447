# setup.py
from setuptools import setup, find_packages

setup(
    name="lispy",
    version="0.0.0.1",
    description="A minimal S-expression arithmetic interpreter",
    python_requires=">=3.9",
    packages=find_packages(include=["lispy", "lispy.*", "lispy_lsp", "lispy_lsp.*"]),
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "lispy=lispy.__main__:main",
            "lispy-ls=lispy_lsp.server:main",
        ],
    },
    zip_safe=False,
)
