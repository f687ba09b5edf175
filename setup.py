import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()


setuptools.setup(
     name='b2upload',
     version='1.0.0',
     scripts=["bin/b2upload.py"],
     description="Simple single file upload to Backblaze B2 buckets",
     long_description=long_description,
     long_description_content_type="text/markdown",
     packages=setuptools.find_packages(exclude=["test"]),
     classifiers=[
         "Programming Language :: Python :: 3.8",
         "License :: OSI Approved :: MIT License",
         "Operating System :: OS Independent",
     ],
    python_requires=">=3.8",
    requires=["requests", "PyYAML"],
    install_requires=["requests>=2.22.0", "PyYAML>=5.4"],
    extras_require={"test": ["pytest>=6.0"]},
 )
