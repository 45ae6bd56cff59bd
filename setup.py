#!/usr/bin/env python

"""Setup file and install script for the bacterial genome annotation pipeline"""

import os
import subprocess

import setuptools

VERSION = '1.2.0'

# add version number and git commit hash of the current revision to version.py
try:
    git_run = subprocess.run(['git', 'rev-parse', '--short', 'HEAD'], stdout=subprocess.PIPE,
                             stderr=subprocess.DEVNULL)
    git_run.check_returncode()
except (OSError, subprocess.SubprocessError):
    commit_hash = ''
else:
    commit_hash = git_run.stdout.strip().decode()

here = os.path.dirname(os.path.abspath(__file__))
with open(os.path.join(here, 'bacanno', 'pipeline', 'version.py'), 'w') as version_file:
    version_file.writelines([f'__version__ = "{VERSION}"\n',
                             f'__git_revision__ = "{commit_hash}"\n'])

# annotation tools are installed into per-stage conda environments at run time,
# see bacanno/config/bacanno_system.yaml
setuptools.setup(name="bacanno",
                 version=VERSION,
                 description="Bacterial genome annotation pipeline with isolated conda tool environments",
                 packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
                 package_data={"bacanno": ["config/*.yaml"]},
                 scripts=["scripts/bacanno_pipeline.py"],
                 entry_points={"console_scripts": ["bacanno = bacanno.pipeline.main:main"]},
                 python_requires=">=3.7",
                 install_requires=["logbook",
                                   "toolz",
                                   "PyYAML",
                                   "requests",
                                   "psutil"],
                 extras_require={"test": ["pytest", "pytest-mock", "mock"]})
