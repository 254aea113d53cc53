"""Wire codecs for CyberTipline documents."""
