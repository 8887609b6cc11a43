"""cmdnest - an embeddable, nested command interpreter.

Applications register commands in a tree of keywords, each with argument
hints, a description and a handler. The interpreter dispatches lines of text
to the handlers, completes keywords, shows argument hints and renders aligned
help for the whole tree. Scripts are run by dispatching their lines.
"""
