"""
Concrete backends and the default registries to select them by type.
"""



from vprov import compute, process, registry, storage
from vprov.providers import maas, rootfs



def storageProviders(runner=None):
    """
    Returns a registry of the available storage providers. Commands are run
    with ``runner`` if given, as local processes otherwise.
    """

    if runner is None:
        runner = process.ProcessRunner()

    providers = registry.Registry(storage.IStorageProvider,
            'storage provider')
    providers.register(rootfs.ROOTFS_PROVIDER_TYPE,
            rootfs.RootfsProvider(runner))

    return providers



def computeProviders(maasClient):
    """
    Returns a registry of the available compute backends, talking to MAAS
    through ``maasClient``.
    """

    environs = registry.Registry(compute.IEnviron, 'compute provider')
    environs.register(maas.MAAS_PROVIDER_TYPE, maas.MAASEnviron(maasClient))

    return environs
