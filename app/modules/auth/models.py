# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - Operator accounts (auth.users table)
# - Sign in and session management
# - JWT token generation and validation
# - Password reset emails

"""
Supabase Auth provides:
- auth.sign_in_with_password() - Authenticate operators
- auth.get_user() - Get current operator from JWT token
- auth.reset_password_for_email() - Send a password reset link
- auth.sign_out() - Sign operators out

Operators are provisioned in the Supabase dashboard; the console has no
self-registration.
"""
