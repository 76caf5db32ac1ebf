from setuptools import find_packages, setup

setup(
    name='swfmeta',
    version='1.0.0',
    description='Extract stage size, frame count and frame rate from SWF files',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    python_requires='>=3.8',
    install_requires=[
        'pydantic>=2.0',
        'PyYAML>=6.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'extract-metadata=swfmeta.cli.main:main',
        ],
    },
)
