"""
Compute backend acquiring nodes from a MAAS server.
"""



from twisted.internet import defer

from zope.interface import Interface, implementer

from vprov import compute, constraints, error, logging
from vprov.providers.maas.constraints import (ConstraintTranslator,
        UNSUPPORTED_CONSTRAINTS)



MAAS_PROVIDER_TYPE = 'maas'



class IMAASClient(Interface):
    """
    Transport to the MAAS API. All methods return deferreds.
    """

    def getArchitectures():
        """
        Fires with the list of architectures of the boot images available on
        the server.
        """


    def acquire(params):
        """
        Acquires a node matching the given dictionary of parameters and fires
        with its description.
        """



@implementer(compute.IEnviron)
class MAASEnviron(object):

    def __init__(self, client, translator=None, log=None):
        if log is None:
            log = logging.Logger(__name__, system='maas')
        if translator is None:
            translator = ConstraintTranslator(log)

        self.client = IMAASClient(client)
        self.translator = translator
        self.log = log


    def supportedArchitectures(self):
        d = defer.maybeDeferred(self.client.getArchitectures)

        def gotError(failure):
            if failure.check(error.ProvisioningError):
                return failure

            raise error.ExecutionFailure('getting supported architectures: '
                    '{0}'.format(failure.value)) from failure.value

        return d.addErrback(gotError)


    @defer.inlineCallbacks
    def constraintsValidator(self):
        validator = constraints.Validator()
        validator.registerUnsupported(UNSUPPORTED_CONSTRAINTS)

        architectures = yield self.supportedArchitectures()
        validator.registerVocabulary(constraints.ARCH, architectures)

        return validator


    @defer.inlineCallbacks
    def acquireNode(self, cons, volumes=(), bindings=()):
        validator = yield self.constraintsValidator()
        cons, warnings = validator.validate(cons)

        for warning in warnings:
            self.log.warning('{0}, ignoring', warning)

        params = self.translator.translate(cons, volumes, bindings)

        self.log.info('Acquiring node matching "{0}"', cons)

        node = yield self.client.acquire(params)

        return node
