import os
import sys

# Add the src directory to the path so the tests run without installing the package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))
