"""
Sacred geometry simulator - pattern composition and generative state engine
"""
