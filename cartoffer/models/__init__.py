from .offer import AppliedOffer, Offer, OfferCreate, OfferType

__all__ = ["AppliedOffer", "Offer", "OfferCreate", "OfferType"]
