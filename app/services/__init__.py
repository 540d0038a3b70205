"""
Intake services: captcha, user directory, application storage.
"""
