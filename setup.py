from glob import glob
from setuptools import setup


setup(
    name='rpnpad',
    version='0.1.0',
    description='Keypad RPN calculator',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
        ],
    },
    packages=['rpnpad'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.8',
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    scripts=glob('bin/*'),
    license='ISC',
)
