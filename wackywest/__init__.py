"""
Wacky Wacky West - Rule engine for a wild west tile placement game.

Two to four players lay railroad, river and street tiles that push shared
workers across a 10x15 town. Covering a building hides it from scoring;
covering an outhouse needs a group vote first. The engine provides:
- Board, worker and hand state
- Legal placement computation
- A pure reducer for every player action
- The outhouse vote
- End-of-game detection and scoring
"""

__version__ = "0.1.0"
