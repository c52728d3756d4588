from setuptools import setup, find_namespace_packages

setup(
    name="librarian",
    version="0.1.0",
    packages=find_namespace_packages(include=['librarian*', 'api*', 'cli*']),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "beautifulsoup4",
        "requests",
        "Pillow",
        "python-dateutil",
        "fastapi",
        "pydantic>=2",
        "uvicorn",
    ],
    extras_require={
        "scanner": [
            "opencv-python-headless",
            "zxing-cpp",
            "pyzbar",
        ],
        "postgres": [
            "psycopg2-binary",
        ],
        "test": [
            "pytest",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "librarian=cli.main:main",
        ],
    },
)
