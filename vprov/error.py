"""
Provisioning related errors.
"""



from twisted.spread import pb



class ProvisioningError(pb.Error):
    """
    Base class for all the errors raised by the provisioning layer. They are
    expected failures and can be transparently raised to a remote caller
    without being logged by the server.

    The message can be prefixed with the name of the operation which failed
    by using the ``annotate`` method, the type of the error is retained.
    """

    def __init__(self, message=''):
        super(ProvisioningError, self).__init__(message)
        self.message = message


    def annotate(self, context):
        """
        Prefixes the message of this error with ``context`` and returns the
        error itself, so that it can be directly re-raised.
        """

        self.message = '{0}: {1}'.format(context, self.message)
        self.args = (self.message,)
        return self


    def __str__(self):
        return self.message



class NotSupported(ProvisioningError):
    """
    Raised when a backend structurally cannot perform the requested
    operation (e.g. volumes on a filesystem only backend).
    """



class InvalidRequest(ProvisioningError):
    """
    Raised when caller supplied data violates a precondition. Requests failing
    with this error shall not be retried without changes.
    """



class InvalidConstraintValue(InvalidRequest):
    """
    Raised when a constraint value is malformed or not part of the vocabulary
    registered for the constraint.
    """



class InvalidBinding(InvalidRequest):
    """
    Raised when a list of interface bindings contains an empty name, an empty
    space identifier or a duplicated name.
    """



class UnsupportedConstraint(ProvisioningError):
    """
    Reported when a constraint set carries a value for a constraint which the
    backend can never honor.
    """

    def __init__(self, name):
        super(UnsupportedConstraint, self).__init__(
                'unsupported constraint: {0}'.format(name))
        self.name = name



class PathNotEmpty(ProvisioningError):
    """
    Raised when the target directory of a filesystem already exists and is
    populated. Such directories are never reused nor cleared.
    """

    def __init__(self, path):
        super(PathNotEmpty, self).__init__(
                'path {0!r} must be empty'.format(path))
        self.path = path



class InsufficientCapacity(ProvisioningError):
    """
    Raised when the measured capacity of a backend is below the requested
    size. Both values are expressed in MiB.
    """

    def __init__(self, available, requested):
        super(InsufficientCapacity, self).__init__(
                'filesystem is not big enough ({0}M < {1}M)'.format(
                        available, requested))
        self.available = available
        self.requested = requested



class ExecutionFailure(ProvisioningError):
    """
    Raised when an underlying command or system call fails. The original
    exception, if any, is available as ``__cause__``.
    """



class UnknownProvider(ProvisioningError):
    """
    Raised when a provider type is requested but was never registered.
    """
