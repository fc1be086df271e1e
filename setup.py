from setuptools import setup, find_packages
import re

# Read version from totalcomp/__init__.py
with open('totalcomp/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='totalcomp',
    version=version,
    packages=find_packages(include=['totalcomp', 'totalcomp.*']),
    package_data={
        'totalcomp': ['fiscal_years/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'totalcomp=totalcomp.cli.__main__:main',
            'totalcomp-mcp=totalcomp.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Take-home compensation calculator and offer comparison for Mexico.',
    python_requires='>=3.10',
)
