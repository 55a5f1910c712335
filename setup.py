"""Setup users_api."""

from setuptools import find_packages, setup

with open("README.md") as f:
    readme = f.read()


extra_reqs = {"test": ["pytest", "pytest-cov", "mock"]}


setup(
    name="users-api",
    version="1.0.0",
    description="Naive URL router serving an in-memory users CRUD API",
    long_description=readme,
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    classifiers=[
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="HTTP router CRUD users",
    license="BSD",
    packages=find_packages(exclude=["ez_setup", "examples", "tests"]),
    include_package_data=True,
    zip_safe=False,
    extras_require=extra_reqs,
    entry_points={"console_scripts": ["users-api = users_api.__main__:main"]},
)
