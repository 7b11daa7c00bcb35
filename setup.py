from setuptools import setup, find_packages

setup(
    name="assessment-extractor",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "PyMuPDF>=1.23.0",
        "pdfplumber>=0.10.0",
        "click>=8.1.0",
        "python-dotenv>=1.0.0",
        "fastapi>=0.104.0",
        "uvicorn>=0.24.0",
        "python-multipart>=0.0.6",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "reportlab>=4.0.0",
            "httpx>=0.25.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "assessment-extract=assessment_extractor.cli:main",
        ],
    },
)
