"""
LockGuard - Lockfile scanner for compromised npm packages

Scans JavaScript/TypeScript lockfiles for packages that match a list
of known-compromised releases:
- yarn.lock (classic)
- package-lock.json / npm-shrinkwrap.json
- pnpm-lock.yaml
- bun.lock

Licensed under the Apache License 2.0
"""

__version__ = "1.0.0"


__all__ = [
    "__version__",
]
