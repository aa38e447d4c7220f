from setuptools import setup, find_packages

with open("requirements.txt") as f:
    required = f.read().splitlines()

setup(
    name="respack",
    version="0.0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=required,
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["respack = respack.cli:main"]},
    description="Embed files into Python modules, with live on-disk overrides",
)
