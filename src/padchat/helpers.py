""" Small collaborators used while shaping outbound payloads: the raw
    message sanitizer applied to a previously received push item before it
    is echoed back to the server, and the app-message XML builder.
"""

from xml.sax.saxutils import escape, quoteattr

from . import casing


# Service accounts that relay system notices rather than conversations.
# Applications usually ignore pushes from these senders.

BLACKLIST = frozenset((
    'weixin',
    'newsapp',
    'tmessage',
    'fmessage',
    'qmessage',
    'floatbottle',
    'medianote',
    'mphelper',
    'weibo',
))


def clear_raw_message(raw):
    """ Return a copy of the push item *raw* suitable for inclusion in a
        follow-up command: the bulky echoed 'data' field is removed, and the
        top-level keys are converted back to the underscore convention the
        server expects. Anything other than a mapping is returned unchanged.
    """

    if not isinstance(raw, dict):
        return raw

    cleaned = dict(raw)
    cleaned.pop('data', None)
    return casing.to_underline(cleaned)


def structure_xml(appid='', sdkver='', title='', des='', url='', thumburl=''):
    """ Assemble the single-line <appmsg> fragment used by the 'sendAppMsg'
        operation. All values are XML-escaped.
    """

    parts = (
        '<appmsg appid=%s sdkver=%s>' % (quoteattr(str(appid)), quoteattr(str(sdkver))),
        '<title>%s</title>' % (escape(str(title))),
        '<des>%s</des>' % (escape(str(des))),
        '<action>view</action>',
        '<type>5</type>',
        '<showtype>0</showtype>',
        '<content></content>',
        '<url>%s</url>' % (escape(str(url))),
        '<thumburl>%s</thumburl>' % (escape(str(thumburl))),
        '</appmsg>',
    )

    return ''.join(parts)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
