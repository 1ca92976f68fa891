import setuptools

import tinct.version

with open("README.md", "r") as readme:
    long_description = readme.read()

setuptools.setup(
    name='tinct',
    version=tinct.version.VERSION,
    author='The tinct authors',
    description='Colored shell prompts from a compact markup language',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages('.', include=['tinct', 'tinct.*']),
    scripts=['bin/tinct'],
    install_requires=[
        'psutil',
        'wcwidth'
    ],
    extras_require={
        'test': ['dill', 'pytest']
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Operating System :: POSIX :: Linux'
    ],
    python_requires='>=3.8'
)
