from setuptools import find_packages, setup

with open("requirements.txt", "r", encoding="UTF-8") as f:
    required = f.read().splitlines()

setup(
    name="yieldpy",
    version="0.1",
    packages=find_packages(include=["yieldpy", "yieldpy.*"]),
    install_requires=required,
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["yieldpy-quote=yieldpy.cli:main"]},
)
