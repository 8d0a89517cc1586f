"""
ScaffoldIE RPGF Evaluator
-------------------------

This package contains modules for:
- load_projects: Reading project rows from the round results CSV
- allocator: Turning vote percentages into basis-point allocations
- submit: Encoding allocations and sending the evaluate transaction
- report: Printing and saving the evaluation summary
- manager: Command line entry point
"""
