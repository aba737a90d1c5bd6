import weakref


class Strong:
    """ A callable holder with the same calling convention as a weak
        reference: calling it returns the referent. Used when a subscriber
        asks for its handler to be kept alive by the subscription itself.
    """

    __slots__ = ('referent',)

    def __init__(self, referent):
        self.referent = referent

    def __call__(self):
        return self.referent

    def __eq__(self, other):
        if isinstance(other, Strong):
            return self.referent == other.referent
        return NotImplemented

    def __hash__(self):
        return hash(self.referent)


def ref(thing, weak=True):
    """ Return a reference to the supplied argument, regardless of whether
        it is a simple object or a bound method. Dereferencing a weak
        reference returns None once the referent is gone; a reference
        requested with *weak* set to False never expires.
    """

    if weak == False:
        return Strong(thing)

    try:
        thing.__func__
        thing.__self__
    except AttributeError:
        return weakref.ref(thing)
    else:
        return weakref.WeakMethod(thing)


def matches(reference, thing):
    """ Return True if dereferencing *reference* yields *thing*. Bound
        methods are compared by equality, since every attribute access
        produces a new bound method object.
    """

    referent = reference()
    if referent is None:
        return False

    return referent is thing or referent == thing


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
