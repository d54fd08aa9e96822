# Supabase table: people
# This file documents the expected database schema
# Actual operations are handled via the document store in service.py

"""
Expected Supabase table structure:

people:
- id: uuid (primary key, default: gen_random_uuid())
  Lookups by a non-uuid id are answered as not found without a query.
- first_name: text (not null)
- last_name: text (not null)
- phone_number: text (not null)
- street_address: text (default: '')
- city: text (default: '')
- tq: text (nullable) - taluk/tehsil
- dist: text (nullable) - district
- state: text (default: '')
- country: text (default: '')
- postal_code: text (default: '')
- created_at: timestamptz (default: now())
- updated_at: timestamptz (nullable)

No unique constraint on (first_name, last_name): the name check runs in the
service before each write and is not transactional.
Deleting a person does not touch groups.members.
"""
