import setuptools

with open("readme.md", "r") as fh:
    long_description = fh.read()

with open('requirements.txt') as f:
    requirements = f.read().splitlines()

setuptools.setup(
    author="VidShare maintainers",
    name="vidshare",
    version="1.0.0",
    description="Video sharing backend with favorites, comments and a searchable feed",
    license="MIT License",
    install_requires=requirements,
    extras_require={"test": ["pytest>=8.0"]},
    packages=setuptools.find_packages(exclude=["tests", "tests.*", "migrations", "migrations.*"]),
    include_package_data=True,
    zip_safe=False,
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires='>=3.11',
)
