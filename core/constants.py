"""
Core — Constants

@file core/constants.py
"""

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 200

ACTIVITY_ACTION_CREATE = 'CREATE'

ACTIVITY_ENTITY_LOT = 'lot'
ACTIVITY_ENTITY_INTERNAL_TRANSFER = 'transfer_internal'
ACTIVITY_ENTITY_SALE = 'sale'
ACTIVITY_ENTITY_TESTING = 'testing'
