from setuptools import setup, find_namespace_packages

setup(
    name="eventsource-logging",
    version="0.1.0a0",
    description="Manifest-driven, level/keyword/channel tagged event logging for Python applications",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["eslog", "eslog.*"]),
    install_requires=[],
    extras_require={
        "test": ["pytest>=7", "pytest-cov"],
    },
    entry_points={
        "console_scripts": ["eslog=eslog.cli:main"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Logging",
    ],
    python_requires=">=3.10",
)
