
from pyrsistent import InvariantException

from twisted.trial import unittest

from vprov import constraints, error



class SelectorTestCase(unittest.TestCase):

    def test_parse(self):
        self.assertEqual(constraints.Selector.parse('ssd'),
                constraints.Selector(value='ssd', excluded=False))
        self.assertEqual(constraints.Selector.parse('^ssd'),
                constraints.Selector(value='ssd', excluded=True))
        self.assertIdentical(constraints.Selector.parse(''), None)
        self.assertIdentical(constraints.Selector.parse('^'), None)


    def test_str(self):
        self.assertEqual(str(constraints.Selector(value='db')), 'db')
        self.assertEqual(str(constraints.Selector(value='db', excluded=True)),
                '^db')


    def test_emptyValue(self):
        self.assertRaises(InvariantException, constraints.Selector, value='')


    def test_selectors(self):
        excluded = constraints.Selector(value='b', excluded=True)

        self.assertEqual(constraints.selectors(['a', '', excluded, '^']), [
            constraints.Selector(value='a'),
            excluded,
        ])



class ConstraintSetTestCase(unittest.TestCase):

    def test_unset(self):
        cons = constraints.ConstraintSet()

        self.assertEqual(cons.names(), [])
        for name in constraints.CONSTRAINT_NAMES:
            self.assertIdentical(cons.value(name), None)
            self.assertFalse(cons.hasValue(name))


    def test_zeroIsSet(self):
        cons = constraints.ConstraintSet(cpuCores=0, mem=0)

        self.assertEqual(cons.names(), [constraints.CPU_CORES,
                constraints.MEM])


    def test_signedLists(self):
        cons = constraints.ConstraintSet(tags=['a', '^b', ''], spaces=[])

        self.assertEqual(list(cons.tags), [
            constraints.Selector(value='a'),
            constraints.Selector(value='b', excluded=True),
        ])
        self.assertFalse(cons.hasValue(constraints.SPACES))
        self.assertEqual(cons.names(), [constraints.TAGS])


    def test_without(self):
        cons = constraints.ConstraintSet(arch='amd64', cpuPower=100)
        stripped = cons.without(constraints.CPU_POWER)

        self.assertEqual(stripped, constraints.ConstraintSet(arch='amd64'))
        self.assertEqual(cons.cpuPower, 100)


    def test_unknownName(self):
        cons = constraints.ConstraintSet()

        self.assertRaises(ValueError, cons.value, 'disk')
        self.assertRaises(ValueError, cons.without, 'disk')


    def test_immutable(self):
        cons = constraints.ConstraintSet(arch='amd64')

        self.assertRaises(AttributeError, setattr, cons, 'arch', 'armhf')


    def test_str(self):
        cons = constraints.ConstraintSet(arch='amd64', mem=512,
                tags=['a', '^b'])

        self.assertEqual(str(cons), 'arch=amd64 mem=512M tags=a,^b')



class ParseTestCase(unittest.TestCase):

    def test_parse(self):
        cons = constraints.parse('arch=amd64 cpu-cores=4 cpu-power=100 mem=4G '
                'instance-type=m1.large tags=ssd,^slow spaces=db,^dmz')

        self.assertEqual(cons, constraints.ConstraintSet(arch='amd64',
                cpuCores=4, cpuPower=100, mem=4096, instanceType='m1.large',
                tags=['ssd', '^slow'], spaces=['db', '^dmz']))


    def test_empty(self):
        self.assertEqual(constraints.parse(''), constraints.ConstraintSet())
        self.assertEqual(constraints.parse('arch= tags='),
                constraints.ConstraintSet())


    def test_memory(self):
        cases = {
            '512': 512,
            '512M': 512,
            '1.5G': 1536,
            '2T': 2 * 1024 ** 2,
            '1P': 1024 ** 3,
            '0.1M': 1,
        }

        for value, expected in cases.items():
            self.assertEqual(constraints.parseMemory(value), expected)


    def test_invalid(self):
        for text in ('arch', 'disk=10', 'cpu-cores=-1', 'cpu-cores=many',
                'mem=4Q', 'mem=-1G', 'arch=amd64 arch=armhf'):
            self.assertRaises(error.InvalidConstraintValue, constraints.parse,
                    text)


    def test_roundTrip(self):
        text = 'arch=amd64 cpu-cores=2 mem=1024M tags=a,^b spaces=^dmz'

        self.assertEqual(str(constraints.parse(text)), text)



class ValidatorTestCase(unittest.TestCase):

    def setUp(self):
        self.validator = constraints.Validator()
        self.validator.registerUnsupported([constraints.CPU_POWER])
        self.validator.registerVocabulary(constraints.ARCH,
                ['amd64', 'armhf'])


    def test_valid(self):
        cons = constraints.parse('arch=amd64 mem=1G tags=ssd')

        effective, warnings = self.validator.validate(cons)

        self.assertEqual(effective, cons)
        self.assertEqual(warnings, [])


    def test_unsupported(self):
        cons = constraints.parse('arch=amd64 cpu-power=100')

        effective, warnings = self.validator.validate(cons)

        self.assertEqual(effective, constraints.ConstraintSet(arch='amd64'))
        self.assertEqual(len(warnings), 1)
        self.assertIsInstance(warnings[0], error.UnsupportedConstraint)
        self.assertEqual(warnings[0].name, constraints.CPU_POWER)

        # The validated set is not modified
        self.assertEqual(cons.cpuPower, 100)


    def test_unsupportedStrict(self):
        cons = constraints.parse('cpu-power=100')

        e = self.assertRaises(error.UnsupportedConstraint,
                self.validator.validate, cons, strict=True)
        self.assertEqual(e.name, constraints.CPU_POWER)


    def test_invalidValue(self):
        cons = constraints.parse('arch=ppc64el')

        e = self.assertRaises(error.InvalidConstraintValue,
                self.validator.validate, cons)
        self.assertEqual(str(e), 'invalid constraint value: arch=ppc64el\n'
                'valid values are: amd64, armhf')


    def test_listVocabulary(self):
        self.validator.registerVocabulary(constraints.TAGS, ['ssd', 'gpu'])

        self.validator.validate(constraints.parse('tags=ssd,^gpu'))
        self.assertRaises(error.InvalidConstraintValue,
                self.validator.validate, constraints.parse('tags=ssd,^tape'))


    def test_unrestricted(self):
        cons = constraints.parse('cpu-cores=64 spaces=anything')

        effective, warnings = self.validator.validate(cons)

        self.assertEqual(effective, cons)


    def test_exclusiveRegistration(self):
        self.assertRaises(ValueError, self.validator.registerVocabulary,
                constraints.CPU_POWER, [100])
        self.assertRaises(ValueError, self.validator.registerUnsupported,
                [constraints.ARCH])
        self.assertRaises(ValueError, self.validator.registerUnsupported,
                ['disk'])
        self.assertRaises(ValueError, self.validator.registerVocabulary,
                'disk', [])
