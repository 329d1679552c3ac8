# -- Input Package -- #

'''
Input collaborators that produce the per-frame steering vector.

Sean Bowman [10/18/2026]
'''

from liquidBottle.inputs.normalizer import InputNormalizer
