from setuptools import find_packages, setup

setup(
    name="prompt-audit",
    version="0.1.0",
    description="Static security audit for LLM system prompts",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "prompt-audit=prompt_audit.cli:main",
        ]
    },
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.10",
)
