"""
Core — Response Renderer

Wraps successful ledger API responses in the standard envelope:
  { "success": true, "data": ..., "meta": ... }

Error bodies are already shaped by core.exceptions.standard_exception_handler
and pass through untouched.

@file core/renderers.py
"""

from rest_framework.renderers import JSONRenderer


class StandardJSONRenderer(JSONRenderer):

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = (renderer_context or {}).get('response')
        if response is not None and response.status_code >= 400:
            return super().render(data, accepted_media_type, renderer_context)

        # 204 responses and pre-wrapped bodies
        if data is None or (isinstance(data, dict) and 'success' in data):
            return super().render(data, accepted_media_type, renderer_context)

        envelope = {'success': True}
        if isinstance(data, dict) and 'results' in data and 'meta' in data:
            envelope['data'] = data['results']
            envelope['meta'] = data['meta']
        else:
            envelope['data'] = data
        return super().render(envelope, accepted_media_type, renderer_context)
