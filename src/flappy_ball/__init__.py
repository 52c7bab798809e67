"""
Flappy Ball: endless pipe game with persistent XP, levels and ranks.
"""
