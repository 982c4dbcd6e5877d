from setuptools import setup, find_packages
import re

# Read version from pmsync/__init__.py
with open('pmsync/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='pmsync',
    version=version,
    packages=find_packages(include=['pmsync', 'pmsync.*']),
    python_requires='>=3.9',
    install_requires=[
        'google-api-python-client',
        'google-auth',
        'google-auth-oauthlib',
        'python-dotenv',
        'click>=8.0',
        'PyYAML',
        'click_option_group',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'pmsync=pmsync.cli.__main__:main',
        ],
    },
    author='CLI Developer',
    description='Gmail <--> file sync for small text notes, stored as messages under a Gmail label.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
