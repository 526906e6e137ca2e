from setuptools import setup, find_packages


setup(
    name="qgd",
    version="0.1",
    packages=find_packages(include=["qgd", "qgd.*"]),
    description="Pack project files into chunked, compressed archives optimised for bulk scanning.",
    author="vercingetorx",
    install_requires=[
        "zstandard>=0.22.0",
    ],
    entry_points={
        "console_scripts": [
            "qgd=qgd.cli:main",
        ]
    },
)
