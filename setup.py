from pathlib import Path

from setuptools import find_packages, setup

root = Path(__file__).parent
readme = root / "README.md"

setup(
    name="splade-core",
    version="0.1.0",
    description="Compile the <script setup> block of server-rendered views into Vue components.",
    long_description=readme.read_text("utf-8") if readme.exists() else "",
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={"splade_core": ["templates/*.js"]},
    include_package_data=True,
    install_requires=[
        "click>=8.1",
        "jinja2>=3.1",
        "rich>=13.0",
        "rich-click>=1.7",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "splade-core=splade_core.cli.main:cli",
        ],
    },
    zip_safe=False,
)
