# Supabase tables: users, seller_profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Credentials are handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

users:
- id: uuid (primary key, references auth.users.id)
- email: text (unique, not null)
- name: text (nullable)
- role: text (not null, default 'BUYER') - BUYER | SELLER
- image: text (nullable)
- email_verified: timestamp (nullable)
- created_at: timestamp (default: now())

seller_profiles:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (unique, references users.id on delete cascade)
- store_name: text (not null)
- verified: boolean (default: false) - products are listed only once verified
- created_at: timestamp (default: now())

Legacy role values USER and ADMIN are rewritten to BUYER and SELLER by
storefront.scripts.migrate_roles.
"""
