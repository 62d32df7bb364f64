# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="projectscope",
    version="0.1.0",
    description="Bounded project structure scanner that produces a reusable project base for LLM context",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["projectscope*"]),
    python_requires=">=3.9",
    install_requires=[
        "tiktoken",  # Token estimation for rendered context
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'projectscope=projectscope.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
