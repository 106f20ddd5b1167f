# setup.py
from setuptools import find_namespace_packages, setup

setup(
    name="codeminifier4ai",
    version="0.1.0",
    description="Minify and chunk source code for LLM context windows and vector indexing",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["codeminifier4ai", "codeminifier4ai.*"]),
    python_requires=">=3.9",
    install_requires=[
        "tiktoken",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'codeminifier4ai=codeminifier4ai.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
