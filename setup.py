from setuptools import find_packages, setup

package_name = 'flightpath_planner'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=['setuptools', 'PyYAML', 'pyproj'],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.8',
    zip_safe=True,
    maintainer='Flight Path Planner Maintainers',
    description='Boustrophedon coverage flight paths for mapping, oblique and strip survey missions.',
    license='Apache-2.0',
    entry_points={
        'console_scripts': [
            'flightpath-planner = flightpath_planner.param_utils:main',
        ],
    },
)
