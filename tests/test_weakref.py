import padchat


class Referenced:
    def a_method(self):
        pass


def test_persistent_object():
    thing = Referenced()

    reference = padchat.weakref.ref(thing)
    assert reference is not None
    assert callable(reference)

    dereferenced = reference()
    assert dereferenced is not None


def test_persistent_object_method():
    """ The standard weakref.ref() reference cannot refer to a bound method,
        as they immediately lose scope and are deallocated; the wrapper
        uses weakref.WeakMethod for those.
    """

    thing = Referenced()

    reference = padchat.weakref.ref(thing.a_method)
    assert reference is not None
    assert callable(reference)

    dereferenced = reference()
    assert dereferenced is not None
    assert callable(dereferenced)


def test_removed_object():
    thing = Referenced()

    reference = padchat.weakref.ref(thing)

    del thing

    dereferenced = reference()
    assert dereferenced is None


def test_removed_object_method():
    thing = Referenced()

    reference = padchat.weakref.ref(thing.a_method)

    del thing

    dereferenced = reference()
    assert dereferenced is None


def test_strong_reference():
    reference = padchat.weakref.ref(lambda: 'value', weak=False)

    dereferenced = reference()
    assert dereferenced is not None
    assert dereferenced() == 'value'


def test_matches():
    thing = Referenced()

    reference = padchat.weakref.ref(thing.a_method)
    assert padchat.weakref.matches(reference, thing.a_method)
    assert not padchat.weakref.matches(reference, Referenced().a_method)

    strong = padchat.weakref.ref(thing, weak=False)
    assert padchat.weakref.matches(strong, thing)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
