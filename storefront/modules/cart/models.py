# Supabase table: cart_items
# products and variants are read for price and stock, never written

"""
Expected Supabase table structure:

cart_items:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (references users.id on delete cascade)
- product_id: uuid (references products.id)
- variant_id: uuid (nullable, references variants.id)
- quantity: integer (> 0)
- added_at: timestamp (default: now())

One row per (user_id, product_id, variant_id); adding the same line again
increments quantity.
"""
