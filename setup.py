"""
Bloomfilter Client Toolkit Setup
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="bloomfilter-client",
    version="0.1.0",
    author="Bloomfilter",
    description="Wallet-authenticated, x402-paying client and MCP server for the Bloomfilter domain API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: Name Service (DNS)",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.10",
    install_requires=[
        "httpx>=0.27.0",
        "eth-account>=0.11.0",
        "mcp>=1.18.0,<2",
        "pydantic>=2.0",
        "click>=8.0.0",
        "pyyaml>=6.0",
        "x402[httpx,evm]",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "black>=23.0.0",
            "mypy>=1.0.0",
            "types-PyYAML",
        ],
    },
    entry_points={
        "console_scripts": [
            "bloomfilter-mcp=bloomfilter_mcp.main:main",
        ],
    },
)
