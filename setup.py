from setuptools import setup, find_packages

__version__ = '0.1.0'

requirements = [
    'coloredlogs',
]

test_requirements = [
    'pytest',
]

setup(
    name='nftledger',
    version=__version__,
    description='In-memory non-fungible token registry with owner gated minting, approvals and metadata URIs.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'test': test_requirements,
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    python_requires='>=3.6',
    zip_safe=True,
    include_package_data=True,
)
