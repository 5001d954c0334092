"""
Core of navy.

An environment ("navy") is a named set of service definitions. Before launch
the definitions pass through a middleware pipeline:

    develop -> tag override -> port override -> virtual hosts

and the transformed set is handed to the runtime. Every other command
(start, stop, restart, kill, rm, pull, ps, port, destroy) goes to the
runtime directly.

The registry finds environments known to the runtime and builds one by name.
Runtime implementations live in compose_interface.
"""
