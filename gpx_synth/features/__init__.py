"""
Feature modules.

- elevation: real and simulated elevation providers
- pacing: pacing curve, speed noise, grade adjustment
- synthesis: timestamp synthesis engine and generation service
- gpx: GPX rendering and route file reading
"""
