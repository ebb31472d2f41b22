from setuptools import setup, find_packages

setup(
    name="pathpad",
    version="0.3.0",
    packages=find_packages(include=["pathpad", "pathpad.*"]),
    description="Inspect and edit the directories in $PATH: reorder, add, remove, clean and revert.",
    author="Max Carlson",
    author_email="carlsonamax@gmail.com",
    url="https://github.com/MaxCarlson/scripts",
    python_requires=">=3.10",
    install_requires=[
        "rich>=13.0",
        "tomli>=2.0; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis>=6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pad=pathpad.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
