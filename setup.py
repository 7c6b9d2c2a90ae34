from setuptools import setup, find_packages

setup(
    name="todostate",
    version="0.1.0",
    description="Reactive state store for a single-list to-do manager",
    author="mseibert",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    py_modules=["config", "main"],
    python_requires=">=3.10",
    install_requires=[
        "Pillow>=10.0.0",
        "PyYAML>=6.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "todostate=main:main",
        ],
    },
)
