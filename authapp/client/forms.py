# Form definitions: one entry per input, in display order.

PASSWORD_RULES = {"required": True, "minLength": 8, "maxLength": 72}

LOGIN_FORM = [
    {"name": "email", "type": "email", "validation": {"required": True}},
    {"name": "password", "type": "password", "validation": {"required": True}},
]

SIGNUP_FORM = [
    {"name": "first_name", "type": "text", "validation": {"required": True, "maxLength": 100}},
    {"name": "last_name", "type": "text", "validation": {"required": True, "maxLength": 100}},
    {"name": "email", "type": "email", "validation": {"required": True}},
    {"name": "password", "type": "password", "validation": PASSWORD_RULES},
    {"name": "confirm_password", "type": "password", "validation": {"required": True, "match": "password"}, "submit": False},
]

TWO_FACTOR_LOGIN_FORM = [
    {"name": "code", "type": "number", "validation": {"required": True, "minLength": 6, "maxLength": 6}},
]

FORGOT_PASSWORD_FORM = [
    {"name": "email", "type": "email", "validation": {"required": True}},
]

RESEND_VERIFICATION_FORM = [
    {"name": "email", "type": "email", "validation": {"required": True}},
]

RESET_PASSWORD_FORM = [
    {"name": "password", "type": "password", "validation": PASSWORD_RULES},
    {"name": "confirm_password", "type": "password", "validation": {"required": True, "match": "password"}, "submit": False},
]

CHANGE_PASSWORD_FORM = [
    {"name": "current_password", "type": "password", "validation": {"required": True}},
    {"name": "password", "type": "password", "validation": PASSWORD_RULES},
    {"name": "confirm_password", "type": "password", "validation": {"required": True, "match": "password"}, "submit": False},
]

PROFILE_FORM = [
    {"name": "first_name", "type": "text", "validation": {"maxLength": 100}},
    {"name": "last_name", "type": "text", "validation": {"maxLength": 100}},
    {"name": "email", "type": "email", "validation": {"required": True}},
]

TWO_FACTOR_FORM = [
    {"name": "code", "type": "number", "validation": {"required": True, "minLength": 6, "maxLength": 6}},
]

TODO_FORM = [
    {"name": "text", "type": "text", "validation": {"required": True, "maxLength": 500}},
]
