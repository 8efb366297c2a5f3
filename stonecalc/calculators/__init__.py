"""
Mode dispatcher: one calculator per calculation mode.

Pure Python math. Given canonical piece dimensions and the mode's target
value, produce the mode's primary quantity (murubba total or piece count).
"""
