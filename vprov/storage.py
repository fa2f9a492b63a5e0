"""
Interfaces and records to work with pluggable storage providers allocating
volumes and filesystems for the machines of the cluster.
"""



from pyrsistent import PClass, PMap, field, pmap

from zope.interface import Interface



CONFIG_STORAGE_DIR = 'storage-dir'



class StorageConfig(PClass):
    """
    The configuration of a storage pool, bound to a provider type. Attribute
    values are strings, booleans or integers.
    """

    name = field(type=str, mandatory=True)
    providerType = field(type=str, mandatory=True)
    attrs = field(type=PMap, initial=pmap(), factory=pmap)


    def valueString(self, key):
        """
        Returns the attribute named ``key`` if it is a string, ``None``
        otherwise.
        """

        value = self.attrs.get(key)
        return value if isinstance(value, str) else None


    def valueBool(self, key):
        value = self.attrs.get(key)
        return value if isinstance(value, bool) else None


    def valueInt(self, key):
        value = self.attrs.get(key)
        if isinstance(value, bool):
            return None
        return value if isinstance(value, int) else None



class FilesystemAttachmentParams(PClass):
    machine = field(type=str, mandatory=True)
    path = field(type=str, initial='')



class FilesystemParams(PClass):
    """
    A request for a single filesystem of at least ``size`` MiB, optionally
    attached to a machine.
    """

    tag = field(type=str, mandatory=True)
    size = field(type=int, mandatory=True)
    attachment = field(type=(FilesystemAttachmentParams, type(None)),
            initial=None)



class Filesystem(PClass):
    """
    An allocated filesystem. ``size`` is the measured capacity in MiB, not
    the requested one.
    """

    tag = field(type=str, mandatory=True)
    size = field(type=int, mandatory=True)



class FilesystemAttachment(PClass):
    filesystem = field(type=str, mandatory=True)
    machine = field(type=str, mandatory=True)
    path = field(type=str, mandatory=True)



class IStorageProvider(Interface):
    """
    Base interface to be implemented by all storage providers.
    """

    def validateConfig(config):
        """
        Statically validates the given ``StorageConfig`` and raises an
        ``error.ProvisioningError`` if it is not acceptable.
        """


    def volumeSource(environConfig, config):
        """
        Returns an ``IVolumeSource`` allocating block volumes as configured
        by ``config``.

        Raises ``error.NotSupported`` if the provider does not provision
        volumes.
        """


    def filesystemSource(environConfig, config):
        """
        Validates ``config`` and returns an ``IFilesystemSource`` allocating
        filesystems as configured by it.
        """



class IVolumeSource(Interface):
    """
    Allocates block volumes. No volume provider is shipped yet.
    """



class IFilesystemSource(Interface):
    """
    Allocates filesystems and attaches them to machines.
    """

    def validateFilesystemParams(params):
        """
        Checks that the given ``FilesystemParams`` can be satisfied by this
        source, without allocating anything.

        May be called on a machine other than the one the filesystem will be
        attached to.
        """


    def createFilesystems(params):
        """
        Creates a filesystem for each of the given ``FilesystemParams``, in
        order.

        Returns a deferred which fires with a ``(filesystems, attachments)``
        tuple of lists. The first failure fails the whole call and the
        results of the previously created filesystems are not returned.
        """



class IDirectoryOperations(Interface):
    """
    Directory related system calls, isolated so that the filesystem
    allocation logic can be exercised against simulated failures.
    """

    def makedirs(path, mode):
        """
        Creates ``path`` and all its missing parents.
        """


    def lstat(path):
        """
        Returns the ``os.stat_result`` of ``path`` without following symbolic
        links. Raises ``FileNotFoundError`` if the path does not exist.
        """


    def fileCount(path):
        """
        Returns the number of entries contained in the ``path`` directory.
        """


    def remove(path):
        """
        Removes the ``path`` directory, which must be empty.
        """



def filesystemSource(providers, environConfig, config):
    """
    Looks up the provider for the type of the ``config`` storage
    configuration in the ``providers`` registry and returns its filesystem
    source.
    """

    provider = providers.get(config.providerType)
    return provider.filesystemSource(environConfig, config)
