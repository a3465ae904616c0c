"""Failure taxonomy for the order automation engine.

Generation errors are per-call: the scheduler records them and carries on
with the batch. None of them is fatal to the host process.
"""


class AutomationError(Exception):
    """Base class; ``code`` is the stable identifier reported to API callers."""

    code = 'automation_error'
    default_message = 'Automation failed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class OutsideWindow(AutomationError):
    code = 'outside_window'
    default_message = 'Outside automation hours'


class GenerationError(AutomationError):
    """A single generator call produced no order."""

    code = 'generation_error'
    default_message = 'Order generation failed'


class AutomationDisabled(GenerationError):
    code = 'automation_disabled'
    default_message = 'Automation is stopped'


class NoProductsAvailable(GenerationError):
    code = 'no_products'
    default_message = 'No products available'


class NoFittingProducts(GenerationError):
    code = 'no_fitting_products'
    default_message = 'No products fit within budget'


class PersistenceFailure(GenerationError):
    code = 'persistence_failure'
    default_message = 'Could not save the order'


class UpstreamUnavailable(GenerationError):
    code = 'upstream_unavailable'
    default_message = 'Data store unavailable'
