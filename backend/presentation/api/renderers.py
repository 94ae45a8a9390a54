"""
Custom renderers for the API.
"""

from rest_framework.renderers import BaseRenderer


class PlainTextRenderer(BaseRenderer):
    """
    Render text responses as ``text/plain``.

    Error responses produced by the exception handler are dicts; only their
    ``detail`` message is written out.
    """

    media_type = 'text/plain'
    format = 'txt'
    charset = 'utf-8'

    def render(self, data, accepted_media_type=None, renderer_context=None):
        if data is None:
            return b''
        if isinstance(data, dict):
            data = data.get('detail', '')
        return str(data).encode(self.charset)
