"""
bench-program: 12-week bench-press periodization planner.

The plan is derived from three starting one-rep maxes (bench press,
2-second paused bench, legs-up bench) through a chain of estimated maxes.
"""

__version__ = "0.1.0"
