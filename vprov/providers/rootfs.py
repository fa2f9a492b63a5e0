"""
A storage provider which allocates filesystems as plain directories on the
root filesystem of the machine they are attached to.

The capacity of a filesystem is the space available on the filesystem holding
its directory, as reported by ``df``.
"""



import os
import re
import stat

from twisted.internet import defer
from twisted.python import filepath

from zope.interface import implementer

from vprov import error, logging, storage, process



ROOTFS_PROVIDER_TYPE = 'rootfs'

DIRECTORY_MODE = 0o755

BLOCKS_PATTERN = re.compile(r'^[0-9]+\Z')



@implementer(storage.IDirectoryOperations)
class OSDirectoryOperations(object):
    """
    The real directory operations, acting on the local filesystem.
    """

    def makedirs(self, path, mode):
        os.makedirs(path, mode)


    def lstat(self, path):
        return os.lstat(path)


    def fileCount(self, path):
        return len(filepath.FilePath(path).listdir())


    def remove(self, path):
        os.rmdir(path)



@implementer(storage.IStorageProvider)
class RootfsProvider(object):
    """
    Provides filesystem sources backed by local directories. Volumes are not
    supported.

    The ``runner`` shall provide ``process.ICommandRunner`` and is used to
    measure the capacity of the created filesystems. The ``log`` is handed
    over to the created sources.
    """

    def __init__(self, runner, dirOps=None, log=None):
        self.runner = process.ICommandRunner(runner)
        self.dirOps = dirOps
        self.log = log


    def validateConfig(self, config):
        # The rootfs provider has no configuration
        pass


    def validateFullConfig(self, config):
        """
        Validates a fully constructed storage configuration, combining the
        user specified configuration and the internally specified one.
        """

        self.validateConfig(config)

        if not config.valueString(storage.CONFIG_STORAGE_DIR):
            raise error.InvalidRequest('storage directory not specified')


    def volumeSource(self, environConfig, config):
        raise error.NotSupported('volumes not supported')


    def filesystemSource(self, environConfig, config):
        self.validateFullConfig(config)

        dirOps = self.dirOps
        if dirOps is None:
            dirOps = OSDirectoryOperations()

        return RootfsFilesystemSource(dirOps, self.runner,
                config.valueString(storage.CONFIG_STORAGE_DIR), self.log)



@implementer(storage.IFilesystemSource)
class RootfsFilesystemSource(object):
    """
    Creates filesystems as empty directories at the path of their attachment.

    Any failure occurring after the directory was created or verified causes
    it to be removed again, so that no unusable mount point is left behind.
    """

    def __init__(self, dirOps, runner, storageDir, log=None):
        if log is None:
            log = logging.Logger(__name__, system='rootfs')

        self.dirOps = storage.IDirectoryOperations(dirOps)
        self.runner = runner
        self.storageDir = storageDir
        self.log = log


    def validateFilesystemParams(self, params):
        # This may be called on a machine other than the one where the
        # filesystem will be mounted, the available size can only be checked
        # at creation time.
        if params.attachment is None:
            raise error.NotSupported('creating filesystem without machine '
                    'attachment not supported')


    @defer.inlineCallbacks
    def createFilesystems(self, args):
        filesystems = []
        attachments = []

        for params in args:
            try:
                filesystem, attachment = yield self.createFilesystem(params)
            except error.ProvisioningError as e:
                raise e.annotate('creating filesystem')

            filesystems.append(filesystem)
            attachments.append(attachment)

        return filesystems, attachments


    @defer.inlineCallbacks
    def createFilesystem(self, params):
        self.validateFilesystemParams(params)

        path = params.attachment.path

        if not path:
            raise error.InvalidRequest('cannot create a filesystem mount '
                    'without specifying a path')

        self.validatePath(path)

        try:
            output = yield self.runner.run('df', '--output=size', path)
        except error.ProvisioningError as e:
            self.removeDirectory(path)
            raise e.annotate('getting size')
        except Exception as e:
            self.removeDirectory(path)
            raise error.ExecutionFailure('getting size of {0!r}: {1}'.format(
                    path, e)) from e

        try:
            blocks = self.parseSize(output)
        except ValueError as e:
            self.removeDirectory(path)
            raise error.ExecutionFailure('parsing size of {0!r}: {1}'.format(
                    path, e)) from e

        sizeInMiB = blocks // 1024

        if sizeInMiB < params.size:
            self.removeDirectory(path)
            raise error.InsufficientCapacity(sizeInMiB, params.size)

        self.log.info('Created filesystem {0} ({1}M) at {2} for machine {3}',
                params.tag, sizeInMiB, path, params.attachment.machine)

        filesystem = storage.Filesystem(tag=params.tag, size=sizeInMiB)
        attachment = storage.FilesystemAttachment(filesystem=params.tag,
                machine=params.attachment.machine, path=path)

        return filesystem, attachment


    def parseSize(self, output):
        """
        Returns the number of 1K blocks reported on the second line of the
        output of ``df --output=size``.
        """

        lines = output.split('\n', 1)

        if len(lines) < 2:
            raise ValueError('unexpected df output {0!r}'.format(output))

        value = lines[1].strip()

        if not BLOCKS_PATTERN.match(value):
            raise ValueError('malformed block count {0!r}'.format(value))

        return int(value)


    def validatePath(self, path):
        """
        Creates the directory at ``path`` if it does not exist, checks that it
        is an empty directory otherwise.

        It is up to the storage provisioner to ensure that any shared storage
        constraints and attachments with the same path are validated, the
        check here is a sanity check.
        """

        try:
            info = self.dirOps.lstat(path)
        except FileNotFoundError:
            self.log.debug('Creating directory {0}', path)

            try:
                self.dirOps.makedirs(path, DIRECTORY_MODE)
            except OSError as e:
                raise error.ExecutionFailure('could not create directory '
                        '{0!r}: {1}'.format(path, e)) from e

            return
        except OSError as e:
            raise error.ExecutionFailure('could not stat {0!r}: {1}'.format(
                    path, e)) from e

        if not stat.S_ISDIR(info.st_mode):
            raise error.InvalidRequest('path {0!r} must be a directory'.format(
                    path))

        try:
            fileCount = self.dirOps.fileCount(path)
        except OSError as e:
            raise error.ExecutionFailure('could not read directory {0!r}: '
                    '{1}'.format(path, e)) from e

        if fileCount > 0:
            raise error.PathNotEmpty(path)


    def removeDirectory(self, path):
        """
        Removes the directory at ``path`` on a best effort basis. Failures are
        logged and not raised.
        """

        try:
            self.dirOps.remove(path)
        except OSError as e:
            self.log.warning('Could not remove directory {0}: {1}', path, e)
