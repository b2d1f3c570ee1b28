from setuptools import setup, find_packages

setup(
    name="ts-interface-builder",
    version="1.0.0",
    description="Compile TypeScript interfaces into runtime validator modules for ts-interface-checker",
    author="ts-interface-builder Team",
    packages=find_packages(include=["ts_interface_builder", "ts_interface_builder.*"]),
    install_requires=[
        "pydantic>=2.0.0",
        "pyyaml>=6.0.0",
        "tree-sitter>=0.23.0",
        "tree-sitter-language-pack>=0.7.0,<1.0",
    ],
    extras_require={
        "test": ["pytest>=7.4.0"],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.10",
    ],
    entry_points={
        "console_scripts": [
            "ts-interface-builder=ts_interface_builder.cli:main",
        ],
    },
)
