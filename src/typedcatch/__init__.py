"""typedcatch: typed try/catch dispatch over captured exception payloads.

Entry points live in subpackages::

    from typedcatch.framework import try_catch, arm, panic_any
    from typedcatch.dispatch import dispatch, Dispatcher
"""
