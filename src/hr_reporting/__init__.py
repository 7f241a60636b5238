"""HR reporting package.

Feature modules (attendance, leave, uniforms, id_cards, ...) normalize raw HR API
payloads into canonical records; the reporting package filters, sorts, paginates
and exports them for the role-specific page controllers.
"""
