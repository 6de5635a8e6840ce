"""RT phraseology scoring"""
