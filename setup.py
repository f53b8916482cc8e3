from setuptools import setup, find_packages


setup(
    name="python-cmd-nexus",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "cmd_nexus": ["data/*.json", "data/*.txt"],
    },
    install_requires=[
        "rich>=10.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "nexus=cmd_nexus.cli.main:main",
            "nexus-usage=cmd_nexus.cli.usage_cmd:main",
        ],
    },
    python_requires=">=3.8",
    description="Command dispatcher with registry-generated usage text",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Environment :: Console",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
