"""Request dispatch core.

Framework-independent pipeline that turns a content path into a redirect,
an attachment stream, a rendered page or an error page.
"""
