"""simulation — The venue simulation context.

Submodules
----------
venue       VenueSim — owns seats, crowd, show state machine, bus and
            log; the command/query boundary used by the viewer
"""
