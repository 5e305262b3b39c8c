'''Components for evaluators, such as divisor functions.'''
