"""Client Layer — the dashboard's view of the gateway (preference cache, panels).

Invariants:
    - Client code only talks to the gateway over HTTP; it never imports the
      store or upstream clients
"""
