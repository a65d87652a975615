"""Setup configuration for reqpipe."""

from setuptools import find_packages, setup

setup(
    name="reqpipe",
    version="0.1.0",
    description="Pluggable request pipeline — fetch, log and transform behind one call",
    python_requires=">=3.10",
    packages=find_packages(where="src", include=["reqpipe*"]),
    package_dir={"": "src"},
    install_requires=[
        "httpx>=0.27.0",
        "pydantic>=2.6.0",
        "pydantic-settings>=2.1.0",
    ],
    entry_points={
        "console_scripts": [
            "reqpipe=reqpipe.cli:cli_entry",
        ],
    },
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
            "pytest-mock>=3.12.0",
            "respx>=0.21.0",
            "python-dotenv>=1.0.0",
        ],
    },
)
