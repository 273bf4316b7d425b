import unittest, sys

testmodules = [
    'tests.unit',
]

loader = unittest.TestLoader()

for t in testmodules:
    suite = loader.discover(t.replace('.', '/'))

    result = unittest.TextTestRunner().run(suite)
    if not result.wasSuccessful():
        sys.exit(1)
