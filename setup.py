# setup.py
from setuptools import setup, find_packages

setup(
    name="p2ptestbed",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        'networkx>=2.8.4',
        'python-dotenv',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'p2ptestbed-generate=p2ptestbed.cli:generate_main',
            'p2ptestbed-analyze=p2ptestbed.cli:analyze_main',
        ],
    },
    description="Topology generator and network configuration analyzer for the P2P testbed",
    python_requires='>=3.8'
)
