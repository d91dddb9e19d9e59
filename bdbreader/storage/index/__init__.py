"""
Access method readers.

Only the BTree access method has a reader. Files using hash, recno, queue or
heap are recognised by the format detector and rejected as unsupported.

BTREE FILE ORGANIZATION:
┌─────────┐ ┌─────────┐ ┌─────────┐ ┌─────────┐
│ Page 0  │ │ Page 1  │ │ Page 2  │ │ Page 3  │ ...
│ (Meta)  │ │ (Root)  │ │ (Leaf)  │ │ (Leaf)  │
└─────────┘ └─────────┘ └─────────┘ └─────────┘

INTERNAL PAGE:  [_ → p2] [k1 → p3] [k2 → p4] ...   first entry has no key
LEAF PAGE:      [key0] [data0] [key1] [data1] ...  keys at even indices
"""
