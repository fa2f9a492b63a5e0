"""
Execution of external commands on the local machine.
"""



import os

from twisted.internet import utils

from zope.interface import Interface, implementer

from vprov import error, logging



class ICommandRunner(Interface):
    """
    Runs commands on the local machine.
    """

    def run(command, *args):
        """
        Runs ``command`` with the given arguments and returns a deferred which
        fires with its standard output as a string.

        Fails with ``error.ExecutionFailure`` if the command can't be run or
        does not exit successfully.
        """



@implementer(ICommandRunner)
class ProcessRunner(object):
    """
    Runs commands as child processes of the given Twisted reactor, with the
    environment of the current process.
    """

    def __init__(self, reactor=None, log=None):
        if log is None:
            log = logging.Logger(__name__, system='process')

        self.reactor = reactor
        self.log = log


    def run(self, command, *args):
        self.log.debug('Running {0} {1}', command, ' '.join(args))

        d = utils.getProcessOutputAndValue(command, args, env=os.environ,
                reactor=self.reactor)

        def gotResult(result):
            stdout, stderr, exitCode = result

            if exitCode:
                raise error.ExecutionFailure('{0} exited with status code '
                        '{1}: {2}'.format(command, exitCode,
                                stderr.decode('utf-8', 'replace').strip()))

            try:
                return stdout.decode('utf-8')
            except UnicodeDecodeError as e:
                raise error.ExecutionFailure('{0} produced undecodable '
                        'output: {1}'.format(command, e)) from e

        def gotSignal(failure):
            # getProcessOutputAndValue errbacks with the output tuple when
            # the process is killed by a signal
            if isinstance(failure.value, tuple):
                signal = failure.value[2]
                raise error.ExecutionFailure('{0} killed by signal '
                        '{1}'.format(command, signal))

            raise error.ExecutionFailure('could not run {0}: {1}'.format(
                    command, failure.value)) from failure.value

        d.addCallbacks(gotResult, gotSignal)
        return d
