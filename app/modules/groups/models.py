# Supabase table: groups
# This file documents the expected database schema
# Actual operations are handled via the document store in service.py

"""
Expected Supabase table structure:

groups:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null)
- description: text (default: '')
- members: text[] (default: '{}') - ids of people; no foreign key
  Entries that are not uuids (legacy ids) never resolve and show up as dangling.
- created_at: timestamptz (default: now())
- updated_at: timestamptz (nullable)

members is replaced as a whole on every membership save. Ids of deleted
people stay in the list until an operator saves a selection without them.
"""
