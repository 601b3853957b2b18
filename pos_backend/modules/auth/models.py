# Supabase Auth
# Identities live in Supabase's auth.users table; this service stores no
# credentials. Supabase Auth handles:
# - User registration (auth.users table)
# - User login and session management
# - JWT token generation and validation
# - Password hashing and security
#
# The identity id (auth.users.id) is the user_id carried by org_memberships.

"""
Supabase Auth provides:
- auth.sign_up() - Register new users
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users
"""
