"""Writers that turn traced spline outlines into CGM, DR2D, EPD, EPS, Elastic Reality and XFig files."""

__version__ = "0.40.0"