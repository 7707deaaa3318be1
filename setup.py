"""Setup configuration for gpusnap package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = (
    readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""
)

setup(
    name="gpusnap",
    version="0.1.0",
    description="Point-in-time GPU telemetry for NVIDIA GPUs and Apple Silicon, served as JSON",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["gpusnap", "gpusnap.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "Topic :: System :: Monitoring",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.100.0,<0.137",
        "uvicorn>=0.23.0",
        "pandas>=1.1.0",
        "pyyaml>=5.3.0",
        "requests>=2.25.0",
        "plotly",
        "streamlit>=1.27.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.12.0",
            "pytest-mock>=3.6.0",
            "httpx>=0.24.0",
            "black>=21.0",
            "flake8>=3.9",
            "isort>=5.0",
        ],
        "test": [
            "pytest>=6.0",
            "pytest-cov>=2.12.0",
            "pytest-mock>=3.6.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "gpusnap=gpusnap.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
