# Lispy: a minimal S-expression arithmetic interpreter.
#
# Source text is parsed into a tagged syntax tree (lispy.reader.parser), lowered
# into a tree of Values (lispy.reader.reader) and reduced by the evaluator
# (lispy.evaluation.evaluator) to a Number or an Error.

__version__ = "0.0.0.1"
