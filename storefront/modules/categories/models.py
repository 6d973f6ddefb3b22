# Supabase table: categories

"""
Expected Supabase table structure:

categories:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null)
- slug: text (unique, not null)
- parent_id: uuid (nullable, references categories.id)
- created_at: timestamp (default: now())
"""
