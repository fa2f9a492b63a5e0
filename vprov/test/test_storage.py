
from twisted.trial import unittest

from vprov import error, registry, storage
from vprov.providers import rootfs, storageProviders, computeProviders
from vprov.test import fakes



class StorageConfigTestCase(unittest.TestCase):

    def setUp(self):
        self.config = storage.StorageConfig(name='local', providerType='rootfs',
                attrs={'dir': '/srv', 'enabled': True, 'size': 10})


    def test_valueString(self):
        self.assertEqual(self.config.valueString('dir'), '/srv')
        self.assertIdentical(self.config.valueString('size'), None)
        self.assertIdentical(self.config.valueString('missing'), None)


    def test_valueBool(self):
        self.assertEqual(self.config.valueBool('enabled'), True)
        self.assertIdentical(self.config.valueBool('dir'), None)


    def test_valueInt(self):
        self.assertEqual(self.config.valueInt('size'), 10)
        self.assertIdentical(self.config.valueInt('enabled'), None)



class RegistryTestCase(unittest.TestCase):

    def setUp(self):
        self.providers = registry.Registry(storage.IStorageProvider)


    def test_register(self):
        provider = rootfs.RootfsProvider(fakes.FakeRunner())
        self.providers.register('rootfs', provider)

        self.assertIdentical(self.providers.get('rootfs'), provider)
        self.assertIn('rootfs', self.providers)
        self.assertEqual(self.providers.types(), ['rootfs'])


    def test_registerTwice(self):
        self.providers.register('rootfs',
                rootfs.RootfsProvider(fakes.FakeRunner()))

        self.assertRaises(ValueError, self.providers.register, 'rootfs',
                rootfs.RootfsProvider(fakes.FakeRunner()))


    def test_registerWrongInterface(self):
        self.assertRaises(TypeError, self.providers.register, 'rootfs',
                object())


    def test_unknown(self):
        e = self.assertRaises(error.UnknownProvider, self.providers.get,
                'ebs')
        self.assertIn("'ebs'", str(e))



class FilesystemSourceTestCase(unittest.TestCase):

    def test_defaultProviders(self):
        providers = storageProviders(fakes.FakeRunner())

        self.assertEqual(providers.types(), [rootfs.ROOTFS_PROVIDER_TYPE])


    def test_filesystemSource(self):
        providers = storageProviders(fakes.FakeRunner())
        config = storage.StorageConfig(name='local', providerType='rootfs',
                attrs={storage.CONFIG_STORAGE_DIR: '/srv'})

        source = storage.filesystemSource(providers, None, config)

        self.assertTrue(storage.IFilesystemSource.providedBy(source))
        self.assertEqual(source.storageDir, '/srv')


    def test_unknownProviderType(self):
        providers = storageProviders(fakes.FakeRunner())
        config = storage.StorageConfig(name='cloud', providerType='ebs')

        self.assertRaises(error.UnknownProvider, storage.filesystemSource,
                providers, None, config)


    def test_computeProviders(self):
        environs = computeProviders(fakes.FakeMAASClient())

        self.assertEqual(environs.types(), ['maas'])
