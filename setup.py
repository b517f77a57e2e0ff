from setuptools import setup, find_packages

setup(
    name="buildops",
    version="0.1.0",
    description="Build automation helpers: version bumping, build stamps, project templates and tool wrappers",
    packages=find_packages(include=["buildops", "buildops.*"]),
    package_data={
        "buildops": ["builtin_templates/*/*"],
    },
    python_requires=">=3.9",
    install_requires=[
        "click>=8.0",
        "rich>=13.0.0",
        "toml>=0.10",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pyfakefs>=5.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "buildops=buildops.__main__:main",
        ]
    },
  )
