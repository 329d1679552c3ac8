# -- Module Entry Point -- #

'''
Allows `python -m liquidBottle`.
'''

from liquidBottle.runner import main

main()
