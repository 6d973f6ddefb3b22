# Supabase tables: orders, order_items, payments, shippings
# Products, variants and categories are read here, never written

"""
Expected Supabase table structure:

orders:
- id: uuid (primary key)
- user_id: uuid (references users.id)
- total: numeric
- status: text - PENDING | PAID | SHIPPED | CANCELLED
- created_at: timestamp (default: now())

order_items:
- id: uuid (primary key)
- order_id: uuid (references orders.id on delete cascade)
- product_id: uuid (references products.id)
- variant_id: uuid (nullable, references variants.id)
- quantity: integer
- price: numeric - unit price at time of purchase

payments:
- id: uuid (primary key)
- order_id: uuid (unique, references orders.id)
- amount: numeric
- currency: text (default: 'SGD')
- status: text - INITIATED | SUCCEEDED | FAILED
- provider_ref: text (nullable, unique) - merchant reference sent to the payment provider

shippings:
- id: uuid (primary key)
- order_id: uuid (unique, references orders.id)
- address, city, state, postal, country: text
"""
